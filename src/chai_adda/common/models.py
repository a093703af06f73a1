"""Shared model pieces for the back office.

Every persisted record gets ``created_at``/``updated_at`` through
``TimestampMixin`` and a public, URL-safe identifier through
``generate_ksuid``. Public ids are what the API exposes; integer primary keys
never leave the database layer."""

from tortoise import fields, models
from ksuid import ksuid


def generate_ksuid():
    """Generate a K-Sortable Unique IDentifier (KSUID).

    KSUIDs are timestamp prefixed, so public ids sort roughly by creation
    time, which keeps store and product listings stable.

    Returns:
        str: A 27 character string representation of the KSUID.
    """
    return str(ksuid.Ksuid())


class TimestampMixin(models.Model):
    # auto_now_add only fills created_at when it is not supplied, so
    # back-dated orders and ledger entries keep their original timestamp.
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True

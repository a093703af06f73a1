"""Reporting for the Chai Adda back office

This package turns a store's ledger, orders and inventory into three
read-only summaries: revenue over a window, orders over a window, and a
point-in-time stock snapshot. Every report is scoped to exactly one store.

The HTTP handlers in ``router`` are thin: they validate query parameters and
delegate to the builders in ``service``, which read through the injectable
``repository.ReportRepository`` and fold rows with the pure helpers in
``aggregation``."""

"""Sales reporting API endpoints for SalesDesk

This module provides the report endpoints used by the management
dashboard: a day-by-day sales report for a month and/or year, a
month-by-month report for the current year, and a searchable per-customer
summary of delivered and picked-up orders.

Handlers coerce their query parameters and delegate to service functions,
which fetch rows through the ORM and fold them with the pure functions in
the aggregation module."""

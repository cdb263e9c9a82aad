"""Expense history ledger for SalesDesk

Paginated listing of historical expense events, labelled with the name
of their expense catalog entry, and deletion of individual records.
Failures are reported as a JSON failure payload rather than an error
status, which is what the existing front-end expects."""

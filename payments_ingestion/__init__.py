"""
payments_ingestion -- Adapters at the boundary of the payments kernel.

Turns raw CSV rows into validated Transaction values and projects accounts
back into flat output rows.

Architecture:
    payments_ingestion/ is a top-level package. It imports from
    payments_kernel; nothing in payments_kernel imports from ingestion.
"""

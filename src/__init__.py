"""
ERP Finance Gateway - Installment & Ledger Service

A FastAPI-based microservice that turns work orders into receivable
installments, computes batch payroll advances, and writes the resulting
financial records to the ERP entity store.
"""

__version__ = "0.1.0"

"""
WMS ledger backend
"""

"""
Wallet-side helpers that read the ledger.
"""

"""
paystore: repositories for the payment-domain entities.

Every entity subpackage offers the same Add/Delete/Update/Query surface over
an in-process store, a Postgres store and, for cards and sessions, the PCI
vault. See paystore.repository for the contract.
"""

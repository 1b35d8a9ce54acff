"""Application layer – export planning use cases."""

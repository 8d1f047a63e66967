"""nailshop: backend de commandes et demandes de prestation (Stripe Checkout + emails)."""

__version__ = "1.0.0"

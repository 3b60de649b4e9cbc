"""Training Admin: user provisioning and administration over Supabase."""

__version__ = "0.1.0"

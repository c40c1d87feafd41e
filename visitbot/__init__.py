"""visitbot: WhatsApp field-visit reporting bot for loan officers."""

__version__ = "0.1.0"

"""WhatsApp channel: inbound webhook and outbound gateway client."""

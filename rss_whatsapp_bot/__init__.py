"""Forward the oldest unseen RSS/Atom entry to a WhatsApp channel."""

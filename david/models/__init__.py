# Make `from david.models import ChatSession, Message` work
from .orm import ChatSession, Message  # re-export

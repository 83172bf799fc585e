"""Browser Phone Gateway - Twilio token, TwiML and call-history backend"""

__version__ = "1.0.0"

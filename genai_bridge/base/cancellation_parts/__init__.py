"""Cancellation implementation parts (see ``genai_bridge.base.cancellation``)."""

"""Game outcome engine, payout math and per-user odds policies for an online casino."""

__version__ = "1.0.0"

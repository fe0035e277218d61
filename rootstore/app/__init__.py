"""Host application wiring."""

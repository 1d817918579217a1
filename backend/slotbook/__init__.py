"""SlotBook availability and booking backend."""

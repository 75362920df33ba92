"""pygame desktop host for the wheel."""

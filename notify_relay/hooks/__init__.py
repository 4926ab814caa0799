"""Client side of the control-plane, run from agent hooks."""

"""Page commands: slots, render, fill."""

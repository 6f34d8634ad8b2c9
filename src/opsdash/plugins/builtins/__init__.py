"""Built-in plugins shipped with opsdash."""

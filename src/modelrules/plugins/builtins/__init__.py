"""Built-in plugins shipped with modelrules."""

"""Document chat assistant: figure citations and generated diagrams."""

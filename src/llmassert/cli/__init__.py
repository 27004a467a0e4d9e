"""llmassert command line interface."""

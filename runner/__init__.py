"""Command line runner that syncs markdown files with a local Anki."""

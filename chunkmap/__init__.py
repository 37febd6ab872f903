"""Read Minecraft Anvil region files and render top-down map images of their chunks."""

__version__ = "0.1.0"
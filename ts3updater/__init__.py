"""TeamSpeak 3 server updater (Python-first, step-driven).

Core design goals:
- Linear pipeline of explicit steps
- Mirror fallback with checksum verification
- Install state persisted next to the server
- Scoped working directory, released on every exit path
- Centralized logging
"""

__version__ = "1.8.0"

__all__ = ["__version__"]

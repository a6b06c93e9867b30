"""create-mern-project: scaffold an Express + MongoDB backend and a Vite + React client."""

__version__ = "1.0.0"

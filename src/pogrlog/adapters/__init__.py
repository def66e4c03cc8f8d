"""Adapters: background dispatch, transports and the stdlib logging bridge."""

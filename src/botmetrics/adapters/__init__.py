"""Adapters connecting the core to sinks, settings and the runtime."""

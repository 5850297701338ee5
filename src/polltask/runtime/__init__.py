"""Runtime layer: leaf tasks, adapters and driver interop."""

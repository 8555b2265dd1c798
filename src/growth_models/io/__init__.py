"""JSON configuration and NumPy artifact I/O."""

"""A small feed-forward neural network built from plain Python lists."""

__version__ = "0.1.0"

__all__ = ["activations", "losses", "optimizers", "layer", "network", "data_loader"]
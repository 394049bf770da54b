"""Random linear network coding, homomorphic commitments, 2D erasure coding and a gossip network simulator."""

__version__ = "0.1.0"
"""
trustfeed — batch trust propagation and topic relevance for transaction graphs.

Reads transaction records, restricts analysis to the bounded neighborhood of a
seed address, propagates EigenTrust-style scores with pre-trust damping, and
attributes the resulting trust to topics with exponential time decay.
"""

__version__ = "0.1.0"

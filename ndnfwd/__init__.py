"""NDN forwarder building blocks: TLV, names, signatures, face URIs and forwarding tables."""

__version__ = "0.0.1"
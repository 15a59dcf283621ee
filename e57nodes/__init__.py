"""Element tree, XML output and value buffers for ASTM E57 3D imaging data."""

__version__ = "0.1.0"
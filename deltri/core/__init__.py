"""Implementation package for deltri; import public names from ``deltri`` instead."""

"""Terminal Pokédex: browse the National Pokédex (generations 1-8) from PokeAPI."""

__version__ = "0.1.0"

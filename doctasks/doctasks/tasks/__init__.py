"""Task kinds: figures, listings and typeset documents."""

"""Default species catalog rendered as cards."""

# Binomial names looked up on GBIF, in display order.
DEFAULT_SPECIES: tuple[str, ...] = (
    "Canis lupus familiaris",
    "Felis catus",
    "Pica pica",
    "Podarcis muralis",
    "Quercus robur",
    "Prunus avium",
    "Poa pratensis",
    "Taraxacum officinale",
)

"""UK telephone number validation against Ofcom numbering allocation data."""

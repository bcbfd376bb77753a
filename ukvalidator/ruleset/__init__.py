"""Rule-set acquisition.

Turns Ofcom numbering-data CSVs into the flat JSON rule set
(``prefixes.json``) that the service loads at start-up, and reads it back.
"""

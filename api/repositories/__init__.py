"""
Persistence adapters.

``filedb`` holds the file-mirrored collections and the two-collection
database; ``json_storage`` is the codec for the backing JSON files.
"""

"""
Sigil - key derivation and signing for osmoboot.
"""

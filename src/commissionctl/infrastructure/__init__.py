"""Infrastructure layer — fee schedule providers and operation sources.

Everything that touches the network or the filesystem lives here.
"""

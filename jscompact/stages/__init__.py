"""Pipeline stages: parameter derivation and result assembly.

Each stage exposes a small, pure function API driven by the resolved options
of a minifier session.
"""

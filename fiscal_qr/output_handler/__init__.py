"""
Output Handler Module for the Fiscal QR Extraction System.

Round-trips the assembled AT QR string into the source PDF's metadata.
"""

from .metadata_injector import MetadataInjector, inject_metadata, SUBJECT_PREFIX

__all__ = ['MetadataInjector', 'inject_metadata', 'SUBJECT_PREFIX']

"""Stylesheet and markup builds for attached loaders."""

from .change_detector import ChangeDetector, FingerprintChangeDetector, TimestampChangeDetector
from .injector import inject_assets, stylesheet_url
from .markup_builder import MarkupBuilder
from .pipeline import BuildResult, LoaderPipeline
from .style_builder import CompiledArtifact, StyleBuilder, loader_rules

__all__ = [
    # Pipeline stages
    'LoaderPipeline',
    'BuildResult',

    # Staleness
    'ChangeDetector',
    'TimestampChangeDetector',
    'FingerprintChangeDetector',

    # Builders
    'StyleBuilder',
    'CompiledArtifact',
    'MarkupBuilder',
    'loader_rules',

    # Host integration
    'inject_assets',
    'stylesheet_url'
]

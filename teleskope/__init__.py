"""Teleskope: profile-driven rendering and topology for Kubernetes resources."""

__version__ = "0.1.0"

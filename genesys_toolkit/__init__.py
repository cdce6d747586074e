"""Genesys Toolkit Installer — provisions Go, the Genesys Cloud CLI, Terraform and Archy."""

__version__ = "0.1.0"

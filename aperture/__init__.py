"""Aperture command-line interface."""

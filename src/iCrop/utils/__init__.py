"""Shared helpers for iCrop."""

"""Data model shared by the iCrop engine and editor."""

"""PyQt6 widgets hosting the baseline bounce."""

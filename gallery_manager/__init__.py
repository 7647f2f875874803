"""Image gallery manager: categorized image records with pluggable storage."""

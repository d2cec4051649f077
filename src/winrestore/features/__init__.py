"""Feature packages: restoration and the feature catalog."""

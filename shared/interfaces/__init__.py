"""HTTP helpers shared by the app viewsets."""

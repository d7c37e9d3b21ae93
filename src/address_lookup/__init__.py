"""PCA Predict address lookup client."""

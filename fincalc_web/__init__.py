"""Flask form pages for the financial calculators."""

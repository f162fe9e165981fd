"""lingocert: assessment and certification engine for language courses."""

"""Document acquisition: remote PDF download and text extraction."""

"""Order number generation for purchase, shipping and sale orders."""

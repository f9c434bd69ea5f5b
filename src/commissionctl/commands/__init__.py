"""CLI support — Click base classes and the shared application context."""

__all__ = ['artifacts']

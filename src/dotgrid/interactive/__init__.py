from dotgrid.interactive.session import GeneratorSession, HeroSession

__all__ = ["GeneratorSession", "HeroSession"]

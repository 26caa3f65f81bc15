"""add-gem — verify gems on RubyGems and append them to a Gemfile."""

__version__ = "0.1.0"

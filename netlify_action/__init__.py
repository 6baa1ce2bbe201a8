"""Deploy a built site to Netlify and report the result to GitHub."""

__version__ = "0.1.0"

"""Small systems programs: an HTTP server, TCP echo and chat, thread exercises and Tk windows."""

__version__ = "0.1.0"
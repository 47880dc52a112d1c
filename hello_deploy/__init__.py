"""hello-deploy: build, publish and roll out the hello service container."""

__version__ = "1.0.0"

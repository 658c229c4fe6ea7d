"""Infrastructure: key-value storage backends and the sequential task runner."""

from .chamber import Chamber

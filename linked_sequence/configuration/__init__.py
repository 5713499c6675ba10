from .hub import ConfigurationHub, ConfigNotFoundError
from .loaders import get_hub, get_settings, reload_settings, reset_hub
from .providers import ConfigProvider, EnvVarConfigProvider, YamlConfigProvider
from .settings import SequenceSettings

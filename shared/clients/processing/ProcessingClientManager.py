from shared.helper.HelperConfig import HelperConfig
from shared.clients.processing.ProcessingClientInterface import ProcessingClientInterface


class ProcessingClientManager:
    """
    Builds the processing client for the engine named in the configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the processing engine name from PROCESSING_ENGINE.

        Returns:
            str: The engine name with its first letter capitalised, e.g. "Gini".
        """
        engine = self.helper_config.get_string_val("PROCESSING_ENGINE", default="gini")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> ProcessingClientInterface:
        """
        Imports and instantiates shared.clients.processing.{engine}.ProcessingClient{Engine}.

        Raises:
            ValueError: If the engine is not supported.
        """
        engine = self._get_engine_from_env()
        className = f"ProcessingClient{engine}"
        try:
            module = __import__(
                f"shared.clients.processing.{engine.lower()}.{className}",
                fromlist=[className],
            )
            client_class = getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported processing engine specified: '{engine}'. Error: {e}")
        client = client_class(helper_config=self.helper_config)
        self.logging.debug(f"Instantiated processing client for engine: {engine}")
        return client

    def get_client(self) -> ProcessingClientInterface:
        return self.client

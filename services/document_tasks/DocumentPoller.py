"""Polling of a document's processing state.

Fetches a document until the service reports a terminal state (complete or
error), waiting at least the current polling interval between two fetches.
"""

from typing import Callable

from shared.clients.processing.ProcessingClientInterface import ProcessingClientInterface
from shared.clients.processing.models.Document import DocumentDetails, DocumentState
from shared.helper.HelperConfig import HelperConfig
from shared.tasks.TaskChain import delay_then


class DocumentPoller:
    """Polls one document per poll() call; concurrent calls run independently."""

    def __init__(
        self,
        helper_config: HelperConfig,
        processing_client: ProcessingClientInterface,
        interval_provider: Callable[[], float],
    ) -> None:
        self.logging = helper_config.get_logger()
        self._client = processing_client
        self._interval_provider = interval_provider

    async def poll(self, document_id: str) -> DocumentDetails:
        """Fetch the document until its state is terminal.

        The interval is read from the provider before every wait. A document in
        the error state is returned like a complete one; callers must check
        its state.

        Args:
            document_id (str): The ID of the document to poll.

        Returns:
            DocumentDetails: The first snapshot with a terminal state.

        Raises:
            RemoteError: As soon as a fetch fails. Failed fetches are not retried.
        """
        attempt = 1
        document = await self._client.do_fetch_document(document_id)
        while not document.state.is_terminal():
            self.logging.debug("Document %s is %s after attempt %d", document_id, document.state.value, attempt)
            attempt += 1
            document = await delay_then(self._interval_provider(), lambda: self._client.do_fetch_document(document_id))

        if document.state == DocumentState.ERROR:
            self.logging.warning("Processing of document %s failed after %d attempt(s)", document_id, attempt)
        else:
            self.logging.info("Document %s is complete after %d attempt(s)", document_id, attempt)
        return document

"""
Module: sqs_store.py
Description: SQS-backed list store for rain checks.

Treats an SQS queue as the durable list: the list key is the queue URL,
push sends a message and pop receives one message and deletes it. Use a
FIFO queue (URL ending in .fifo) to keep FIFO ordering per key.

Dependencies: aioboto3, botocore
"""

import uuid
from typing import Optional

from aioboto3 import Session
from botocore.exceptions import ClientError

from raincheck.utils.logger import get_logger

logger = get_logger(__name__)

FIFO_MESSAGE_GROUP_ID = "raincheck"


class SQSListStore:
    """
    List store backed by SQS queues.

    Each list key is the URL of an SQS queue. Receiving and deleting a
    message are two calls, so a consumer that dies between them leaves
    the message to reappear after its visibility timeout.
    """

    def __init__(self, session: Optional[Session] = None, region_name: Optional[str] = None):
        """
        Initialize SQS list store.

        Args:
            session: aioboto3 session to create clients from
            region_name: Optional AWS region for the SQS client
        """
        self.session = session or Session()
        self.region_name = region_name

        logger.info(
            "SQS list store initialized",
            region_name=region_name
        )

    def _client(self):
        if self.region_name:
            return self.session.client('sqs', region_name=self.region_name)
        return self.session.client('sqs')

    async def push_tail(self, list_key: str, value: str) -> None:
        """
        Send a value to the SQS queue at list_key.

        Raises:
            ClientError: If the SQS operation fails
            ValueError: If list_key is empty
        """
        if not list_key or not isinstance(list_key, str):
            raise ValueError("list_key must be a non-empty queue URL")

        params = {
            'QueueUrl': list_key,
            'MessageBody': value,
        }
        if list_key.endswith('.fifo'):
            params['MessageGroupId'] = FIFO_MESSAGE_GROUP_ID
            # The same rain check text may be requeued, so each push gets its own id
            params['MessageDeduplicationId'] = uuid.uuid4().hex
        else:
            logger.warning(
                "Queue is not FIFO, rain check order is not guaranteed",
                queue_url=list_key
            )

        try:
            async with self._client() as sqs:
                response = await sqs.send_message(**params)

            logger.debug(
                "Message sent to SQS",
                message_id=response['MessageId'],
                queue_url=list_key
            )

        except ClientError as e:
            logger.error(
                "Failed to send message to SQS",
                queue_url=list_key,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    async def pop_head(self, list_key: str) -> Optional[str]:
        """
        Receive and delete one message from the SQS queue at list_key.

        Returns:
            The message body, or None if no message is available

        Raises:
            ClientError: If the SQS operation fails
        """
        if not list_key or not isinstance(list_key, str):
            raise ValueError("list_key must be a non-empty queue URL")

        try:
            async with self._client() as sqs:
                response = await sqs.receive_message(
                    QueueUrl=list_key,
                    MaxNumberOfMessages=1,
                    WaitTimeSeconds=0
                )

                messages = response.get('Messages', [])
                if not messages:
                    return None

                message = messages[0]
                await sqs.delete_message(
                    QueueUrl=list_key,
                    ReceiptHandle=message['ReceiptHandle']
                )

            logger.debug(
                "Message popped from SQS",
                message_id=message.get('MessageId'),
                queue_url=list_key
            )

            return message['Body']

        except ClientError as e:
            logger.error(
                "Failed to pop message from SQS",
                queue_url=list_key,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

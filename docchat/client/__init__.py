"""HTTP access to the remote indexing and chat service."""

from docchat.client.network import NetworkClient, UploadReceipt

__all__ = ["NetworkClient", "UploadReceipt"]

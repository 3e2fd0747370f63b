"""MongoDB connection management using Motor async driver."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase


class MongoDB:
    """
    MongoDB connection manager.

    Holds one client per instance; create it at the entry point and pass
    it to whatever needs a database.
    """

    def __init__(self, uri: str, db_name: str = "menusnap") -> None:
        """
        Args:
            uri: MongoDB connection URI
            db_name: Database name to use
        """
        self.uri = uri
        self.db_name = db_name
        self.client: AsyncIOMotorClient | None = None

    def connect(self) -> None:
        """Initialize MongoDB connection."""
        if self.client is None:
            self.client = AsyncIOMotorClient(self.uri)

    def close(self) -> None:
        """Close MongoDB connection."""
        if self.client is not None:
            self.client.close()
            self.client = None

    def get_client(self) -> AsyncIOMotorClient:
        """
        Get the MongoDB client.

        Raises:
            RuntimeError: If MongoDB is not connected
        """
        if self.client is None:
            raise RuntimeError("MongoDB not connected. Call connect() first.")
        return self.client

    def get_database(self, name: str | None = None) -> AsyncIOMotorDatabase:
        """
        Get a database instance.

        Args:
            name: Database name (uses default if not provided)
        """
        client = self.get_client()
        return client[name or self.db_name]

    def is_connected(self) -> bool:
        """Check if MongoDB is connected."""
        return self.client is not None

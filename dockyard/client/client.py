"""Docker client facade.

One coroutine per supported API operation. Each is a fixed composition:
dispatch the request, map the response with the operation's decoder, and
return the value. Classified API errors are raised; transport errors
propagate unchanged.

Usage:
    config = ContainerConfig.with_image("alpine").name("test").build()
    async with DockerClient() as client:
        created = await client.create_container(config)
        await client.start_container(created.id)
"""

from typing import Any, Mapping, Optional

from dockyard.builders.container import ContainerConfig
from dockyard.builders.filters import Filters
from dockyard.builders.image import ImagePullConfig, RegistryAuth
from dockyard.builders.network import NetworkConfig
from dockyard.builders.volume import VolumeConfig
from dockyard.client.catalog import Operation
from dockyard.client.dispatcher import Payload, RequestDispatcher
from dockyard.client.mapper import (
    ApiResult,
    Decoder,
    Err,
    ResponseMapper,
    empty_decoder,
    json_lines_decoder,
    log_stream_decoder,
    model_decoder,
    raw_decoder,
    text_decoder,
)
from dockyard.client.transport import HttpxTransport, Transport
from dockyard.config import Settings, get_settings
from dockyard.exceptions import ServerFaultError
from dockyard.logging_config import get_logger, log_error, log_operation
from dockyard.models import (
    ContainerInfo,
    ContainerSummary,
    CreatedContainer,
    CreatedNetwork,
    FileSystemChange,
    ImageDeleteItem,
    ImageInfo,
    ImageSummary,
    NetworkInfo,
    ProcessList,
    PullProgress,
    VersionInfo,
    VolumeInfo,
    VolumeList,
    VolumePruneReport,
    WaitCondition,
    WaitStatus,
)

logger = get_logger(__name__)

FiltersArg = Optional[Filters | Mapping[str, list[str]]]


def _filters(filters: FiltersArg) -> Optional[dict[str, list[str]]]:
    if not filters:
        return None
    if isinstance(filters, Filters):
        return filters.as_dict()
    return {key: list(values) for key, values in filters.items()}


class DockerClient:
    """
    Typed client for the Docker Engine API.

    Construction chooses the daemon endpoint but does not connect; the first
    request opens the connection. The client holds no mutable state of its
    own and may be shared by concurrent tasks.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the client.

        Args:
            endpoint: Docker host (``unix:///var/run/docker.sock``, a socket
                path, or ``tcp://host:port``). Defaults to settings.docker_host.
            api_version: API version prefix (defaults to settings)
            timeout: Per-request timeout in seconds (defaults to settings)
            settings: Settings to read defaults from (defaults to get_settings())
            transport: Pre-built transport; overrides endpoint/api_version/timeout
        """
        if transport is None:
            settings = settings or get_settings()
            transport = HttpxTransport(
                endpoint or settings.docker_host,
                api_version=(
                    api_version if api_version is not None else settings.docker_api_version
                ),
                timeout=timeout if timeout is not None else settings.docker_timeout_seconds,
            )

        self.transport = transport
        self.dispatcher = RequestDispatcher(transport)
        self.mapper = ResponseMapper()

    @property
    def endpoint(self) -> str:
        return self.transport.endpoint

    async def __aenter__(self) -> "DockerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the transport's pooled connections."""
        await self.transport.close()

    def __repr__(self) -> str:
        return f"<DockerClient endpoint={self.endpoint!r}>"

    async def execute(
        self,
        operation: Operation,
        decoder: Decoder,
        payload: Optional[Payload] = None,
        path_params: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResult:
        """
        Run one operation and return its :data:`ApiResult` without raising.

        Transport failures still raise, since no response exists to classify.
        """
        response = await self.dispatcher.send(
            operation,
            payload=payload,
            path_params=path_params,
            query=query,
            headers=headers,
        )
        return self.mapper.map(response, operation, decoder)

    async def _call(
        self,
        operation: Operation,
        decoder: Decoder,
        payload: Optional[Payload] = None,
        path_params: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        result = await self.execute(operation, decoder, payload, path_params, query, headers)
        resource_id = next(iter((path_params or {}).values()), None)
        if isinstance(result, Err):
            log_error(
                logger,
                result.error,
                operation.name,
                resource_id=resource_id,
                status_code=result.error.status_code,
            )
        return result.unwrap()

    # System

    async def ping(self) -> str:
        """Check that the daemon answers; returns ``"OK"``."""
        return await self._call(Operation.SYSTEM_PING, text_decoder)

    async def version(self) -> VersionInfo:
        return await self._call(Operation.SYSTEM_VERSION, model_decoder(VersionInfo))

    # Containers

    async def create_container(self, config: ContainerConfig) -> CreatedContainer:
        """
        Create a container from a built config.

        Raises:
            NotFoundError: If the image does not exist locally
            ConflictError: If the container name is already in use
            InvalidRequestError: If the daemon rejects the config
        """
        created = await self._call(
            Operation.CONTAINER_CREATE,
            model_decoder(CreatedContainer),
            payload=config,
        )
        log_operation(
            logger,
            "container_created",
            resource_id=created.id[:12],
            image=config.image,
            name=config.name,
        )
        return created

    async def list_containers(
        self,
        all: bool = False,
        limit: Optional[int] = None,
        size: bool = False,
        filters: FiltersArg = None,
    ) -> list[ContainerSummary]:
        """
        List containers.

        Args:
            all: Include stopped containers
            limit: Return at most this many recently created containers
            size: Include size information
            filters: Label/status/name filters
        """
        return await self._call(
            Operation.CONTAINER_LIST,
            model_decoder(list[ContainerSummary]),
            query={"all": all, "limit": limit, "size": size, "filters": _filters(filters)},
        )

    async def inspect_container(self, container_id: str, size: bool = False) -> ContainerInfo:
        return await self._call(
            Operation.CONTAINER_INSPECT,
            model_decoder(ContainerInfo),
            path_params={"id": container_id},
            query={"size": size},
        )

    async def container_changes(self, container_id: str) -> list[FileSystemChange]:
        """Files added, deleted or modified in the container's filesystem."""
        return await self._call(
            Operation.CONTAINER_CHANGES,
            model_decoder(list[FileSystemChange]),
            path_params={"id": container_id},
        )

    async def container_logs(
        self,
        container_id: str,
        stdout: bool = True,
        stderr: bool = True,
        timestamps: bool = False,
        tail: Optional[int] = None,
        since: Optional[int] = None,
    ) -> str:
        """
        Fetch container logs as text.

        Args:
            container_id: Container ID or name
            stdout: Include stdout
            stderr: Include stderr
            timestamps: Prefix lines with timestamps
            tail: Only the last N lines (all when None)
            since: Only logs since this Unix timestamp
        """
        return await self._call(
            Operation.CONTAINER_LOGS,
            log_stream_decoder,
            path_params={"id": container_id},
            query={
                "stdout": stdout,
                "stderr": stderr,
                "timestamps": timestamps,
                "tail": "all" if tail is None else tail,
                "since": since,
            },
        )

    async def list_processes(
        self, container_id: str, ps_args: Optional[str] = None
    ) -> ProcessList:
        """
        List processes running inside a container.

        Args:
            container_id: Container ID or name
            ps_args: Arguments passed to ``ps`` (daemon default ``-ef``)

        Raises:
            ConflictError: If the container is not running
        """
        return await self._call(
            Operation.CONTAINER_TOP,
            model_decoder(ProcessList),
            path_params={"id": container_id},
            query={"ps_args": ps_args},
        )

    async def export_container(self, container_id: str) -> bytes:
        """Export the container's filesystem as an uncompressed tar archive."""
        return await self._call(
            Operation.CONTAINER_EXPORT,
            raw_decoder,
            path_params={"id": container_id},
        )

    async def start_container(
        self, container_id: str, detach_keys: Optional[str] = None
    ) -> None:
        """Start a container. Starting a running container is not an error."""
        await self._call(
            Operation.CONTAINER_START,
            empty_decoder,
            path_params={"id": container_id},
            query={"detachKeys": detach_keys},
        )

    async def stop_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        """Stop a container, killing it after ``timeout`` seconds."""
        await self._call(
            Operation.CONTAINER_STOP,
            empty_decoder,
            path_params={"id": container_id},
            query={"t": timeout},
        )

    async def restart_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        await self._call(
            Operation.CONTAINER_RESTART,
            empty_decoder,
            path_params={"id": container_id},
            query={"t": timeout},
        )

    async def kill_container(self, container_id: str, signal: Optional[str] = None) -> None:
        """Send a signal (default SIGKILL) to a running container.

        Raises:
            ConflictError: If the container is not running
        """
        await self._call(
            Operation.CONTAINER_KILL,
            empty_decoder,
            path_params={"id": container_id},
            query={"signal": signal},
        )

    async def pause_container(self, container_id: str) -> None:
        await self._call(
            Operation.CONTAINER_PAUSE, empty_decoder, path_params={"id": container_id}
        )

    async def unpause_container(self, container_id: str) -> None:
        await self._call(
            Operation.CONTAINER_UNPAUSE, empty_decoder, path_params={"id": container_id}
        )

    async def rename_container(self, container_id: str, new_name: str) -> None:
        """
        Rename a container.

        Raises:
            ConflictError: If ``new_name`` is already in use
        """
        await self._call(
            Operation.CONTAINER_RENAME,
            empty_decoder,
            path_params={"id": container_id},
            query={"name": new_name},
        )

    async def wait_container(
        self,
        container_id: str,
        condition: WaitCondition = WaitCondition.NOT_RUNNING,
    ) -> WaitStatus:
        """Block until the container meets ``condition``; returns its exit status."""
        return await self._call(
            Operation.CONTAINER_WAIT,
            model_decoder(WaitStatus),
            path_params={"id": container_id},
            query={"condition": condition},
        )

    async def remove_container(
        self,
        container_id: str,
        volumes: bool = False,
        force: bool = False,
        link: bool = False,
    ) -> None:
        """
        Remove a container.

        Args:
            container_id: Container ID or name
            volumes: Also remove anonymous volumes
            force: Kill the container first if it is running
            link: Remove the specified link instead of the container

        Raises:
            ConflictError: If the container is running and ``force`` is False
        """
        await self._call(
            Operation.CONTAINER_REMOVE,
            empty_decoder,
            path_params={"id": container_id},
            query={"v": volumes, "force": force, "link": link},
        )
        log_operation(logger, "container_removed", resource_id=container_id)

    # Images

    async def list_images(
        self, all: bool = False, filters: FiltersArg = None
    ) -> list[ImageSummary]:
        return await self._call(
            Operation.IMAGE_LIST,
            model_decoder(list[ImageSummary]),
            query={"all": all, "filters": _filters(filters)},
        )

    async def pull_image(
        self, config: ImagePullConfig, auth: Optional[RegistryAuth] = None
    ) -> list[PullProgress]:
        """
        Pull an image and return its progress events.

        Args:
            config: Built pull parameters
            auth: Credentials for a private registry

        Raises:
            NotFoundError: If the repository does not exist
            ServerFaultError: If the daemon reports an error inside the
                progress stream after answering 200
        """
        events = await self._call(
            Operation.IMAGE_PULL,
            json_lines_decoder(PullProgress),
            payload=config,
            headers=auth.as_headers() if auth is not None else None,
        )
        failed = next((event for event in events if event.error), None)
        if failed is not None:
            error = ServerFaultError(
                f"Pull of {config.reference} failed: {failed.error}",
                status_code=200,
            )
            log_error(logger, error, Operation.IMAGE_PULL.name, resource_id=config.reference)
            raise error

        log_operation(logger, "image_pulled", resource_id=config.reference)
        return events

    async def inspect_image(self, name: str) -> ImageInfo:
        return await self._call(
            Operation.IMAGE_INSPECT,
            model_decoder(ImageInfo),
            path_params={"name": name},
        )

    async def remove_image(
        self, name: str, force: bool = False, noprune: bool = False
    ) -> list[ImageDeleteItem]:
        """
        Remove an image.

        Raises:
            ConflictError: If a container uses the image and ``force`` is False
        """
        return await self._call(
            Operation.IMAGE_REMOVE,
            model_decoder(list[ImageDeleteItem]),
            path_params={"name": name},
            query={"force": force, "noprune": noprune},
        )

    # Networks

    async def list_networks(self, filters: FiltersArg = None) -> list[NetworkInfo]:
        return await self._call(
            Operation.NETWORK_LIST,
            model_decoder(list[NetworkInfo]),
            query={"filters": _filters(filters)},
        )

    async def create_network(self, config: NetworkConfig) -> CreatedNetwork:
        """
        Create a network.

        Raises:
            ConflictError: If a network with the same name exists
        """
        created = await self._call(
            Operation.NETWORK_CREATE,
            model_decoder(CreatedNetwork),
            payload=config,
        )
        log_operation(logger, "network_created", resource_id=created.id[:12], name=config.name)
        return created

    async def inspect_network(self, network_id: str) -> NetworkInfo:
        return await self._call(
            Operation.NETWORK_INSPECT,
            model_decoder(NetworkInfo),
            path_params={"id": network_id},
        )

    async def remove_network(self, network_id: str) -> None:
        await self._call(
            Operation.NETWORK_REMOVE, empty_decoder, path_params={"id": network_id}
        )

    async def connect_network(self, network_id: str, container_id: str) -> None:
        """Attach a container to a network."""
        await self._call(
            Operation.NETWORK_CONNECT,
            empty_decoder,
            payload={"Container": container_id},
            path_params={"id": network_id},
        )

    async def disconnect_network(
        self, network_id: str, container_id: str, force: bool = False
    ) -> None:
        """Detach a container from a network."""
        await self._call(
            Operation.NETWORK_DISCONNECT,
            empty_decoder,
            payload={"Container": container_id, "Force": force},
            path_params={"id": network_id},
        )

    # Volumes

    async def list_volumes(self, filters: FiltersArg = None) -> VolumeList:
        return await self._call(
            Operation.VOLUME_LIST,
            model_decoder(VolumeList),
            query={"filters": _filters(filters)},
        )

    async def create_volume(self, config: VolumeConfig) -> VolumeInfo:
        volume = await self._call(
            Operation.VOLUME_CREATE,
            model_decoder(VolumeInfo),
            payload=config,
        )
        log_operation(logger, "volume_created", resource_id=volume.name)
        return volume

    async def inspect_volume(self, name: str) -> VolumeInfo:
        return await self._call(
            Operation.VOLUME_INSPECT,
            model_decoder(VolumeInfo),
            path_params={"name": name},
        )

    async def remove_volume(self, name: str, force: bool = False) -> None:
        """
        Remove a volume.

        Raises:
            ConflictError: If the volume is in use
        """
        await self._call(
            Operation.VOLUME_REMOVE,
            empty_decoder,
            path_params={"name": name},
            query={"force": force},
        )

    async def prune_volumes(self, filters: FiltersArg = None) -> VolumePruneReport:
        """Delete unused volumes."""
        return await self._call(
            Operation.VOLUME_PRUNE,
            model_decoder(VolumePruneReport),
            query={"filters": _filters(filters)},
        )

"""Deploy tasks for the ERC-721 collection contracts and their tag-based runner."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from .constants import DEFAULT_CONTRACT_BPS
from .deploy import DeployContext, deploy_contract
from .encoding import configure_events, generate_init_code
from .exceptions import ConfigurationError
from .types import ContractDescriptor, DeploymentResult

logger = logging.getLogger(__name__)

TaskFunc = Callable[[DeployContext], List[DeploymentResult]]

# Init code layout shared by Holograph collection contracts:
# contractName, contractSymbol, contractBps, eventConfig, skipInit, initCode
COLLECTION_INIT_TYPES = ["string", "string", "uint16", "uint256", "bool", "bytes"]


@dataclass
class DeployTask:
    """A named deploy step, selected by tags and ordered by dependency tags."""

    name: str
    func: TaskFunc
    tags: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)

    def __call__(self, context: DeployContext) -> List[DeploymentResult]:
        return self.func(context)


TASKS: List[DeployTask] = []


def deploy_task(tags: Iterable[str], dependencies: Iterable[str] = ()):
    """Register a function as a deploy task."""

    def decorator(func: TaskFunc) -> DeployTask:
        task = DeployTask(
            name=func.__name__,
            func=func,
            tags=list(tags),
            dependencies=list(dependencies),
        )
        TASKS.append(task)
        return task

    return decorator


def collection_descriptor(name: str, contract_name: str, symbol: str, owner: str) -> ContractDescriptor:
    """Descriptor of a Holograph collection contract owned by owner."""
    return ContractDescriptor(
        name=name,
        init_types=COLLECTION_INIT_TYPES,
        init_values=[
            contract_name,
            symbol,
            DEFAULT_CONTRACT_BPS,
            configure_events([]),
            True,  # skipInit
            generate_init_code(["address"], [owner]),
        ],
    )


def owner_descriptor(name: str, owner: str) -> ContractDescriptor:
    """Descriptor of a contract initialized with only its owner address."""
    return ContractDescriptor(name=name, init_types=["address"], init_values=[owner])


@deploy_task(
    tags=["HolographERC721", "CxipERC721", "DeployERC721"],
    dependencies=["HolographGenesis", "DeploySources"],
)
def deploy_erc721(context: DeployContext) -> List[DeploymentResult]:
    owner = context.deployer_address
    return [
        deploy_contract(
            context,
            collection_descriptor("HolographERC721", "Holograph ERC721 Collection", "hNFT", owner),
        ),
        deploy_contract(context, owner_descriptor("CxipERC721", owner)),
    ]


@deploy_task(
    tags=["HolographERC721Drop", "DeployERC721"],
    dependencies=["HolographGenesis", "DeploySources"],
)
def deploy_erc721_drop(context: DeployContext) -> List[DeploymentResult]:
    owner = context.deployer_address
    return [
        deploy_contract(
            context,
            collection_descriptor(
                "HolographERC721Drop", "Holograph ERC721 Drop Collection", "hDropNFT", owner
            ),
        ),
    ]


def _tasks_with_tag(tag: str, tasks: List[DeployTask]) -> List[DeployTask]:
    return [task for task in tasks if tag in task.tags]


def resolve_order(
    tags: Optional[Iterable[str]] = None, tasks: Optional[List[DeployTask]] = None
) -> List[DeployTask]:
    """
    Order the tasks selected by tags so that dependencies run first.

    Args:
        tags: Tags to run (defaults to every registered task)
        tasks: Task registry (defaults to TASKS)

    Returns:
        Tasks in execution order, each at most once

    Raises:
        ConfigurationError: If a tag matches nothing or dependencies form a cycle
    """
    if tasks is None:
        tasks = TASKS

    if tags is None:
        selected = list(tasks)
    else:
        selected = []
        for tag in tags:
            matching = _tasks_with_tag(tag, tasks)
            if not matching:
                raise ConfigurationError(f"No deploy task has tag '{tag}'")
            selected.extend(t for t in matching if t not in selected)

    ordered: List[DeployTask] = []
    visiting: List[str] = []

    def visit(task: DeployTask) -> None:
        if task in ordered:
            return
        if task.name in visiting:
            cycle = " -> ".join(visiting + [task.name])
            raise ConfigurationError(f"Deploy task dependency cycle: {cycle}")
        visiting.append(task.name)
        for dependency in task.dependencies:
            providers = _tasks_with_tag(dependency, tasks)
            if not providers:
                logger.debug(
                    "Dependency '%s' of %s has no task here, assuming it ran already",
                    dependency,
                    task.name,
                )
            for provider in providers:
                visit(provider)
        visiting.pop()
        ordered.append(task)

    for task in selected:
        visit(task)

    return ordered


def run_tags(
    context: DeployContext,
    tags: Optional[Iterable[str]] = None,
    tasks: Optional[List[DeployTask]] = None,
) -> Dict[str, List[DeploymentResult]]:
    """
    Run the tasks selected by tags against one network.

    The first failing task stops the run; its error propagates.

    Args:
        context: Deploy context
        tags: Tags to run (defaults to every registered task)
        tasks: Task registry (defaults to TASKS)

    Returns:
        Mapping of task name to the results it produced
    """
    results: Dict[str, List[DeploymentResult]] = {}
    for task in resolve_order(tags, tasks):
        logger.info("Running deploy task %s on %s", task.name, context.network.name)
        results[task.name] = task(context)
    return results

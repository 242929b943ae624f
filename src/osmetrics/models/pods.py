# src/osmetrics/models/pods.py
"""
Pydantic models describing the pods the exporter inspects.
They are built by the PodLister from Kubernetes API objects and are
read-only to the rest of the pipeline.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

TERMINAL_PHASES = frozenset({"Succeeded", "Failed"})


class ResourceQuantities(BaseModel):
    """Raw memory/CPU quantity strings, as declared in a container spec."""

    model_config = ConfigDict(frozen=True)

    memory: Optional[str] = None
    cpu: Optional[str] = None


class ContainerResources(BaseModel):
    model_config = ConfigDict(frozen=True)

    limits: ResourceQuantities = Field(default_factory=ResourceQuantities)
    requests: ResourceQuantities = Field(default_factory=ResourceQuantities)


class ContainerSpec(BaseModel):
    """Declared resources of a single container."""

    model_config = ConfigDict(frozen=True)

    name: str
    resources: ContainerResources = Field(default_factory=ContainerResources)


class PodDescriptor(BaseModel):
    """Identity, lifecycle phase and container specs of a pod."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The name of the Kubernetes pod.")
    namespace: str = Field(..., description="The namespace the pod belongs to.")
    phase: Optional[str] = Field(None, description="The pod lifecycle phase (Pending, Running, ...).")
    containers: List[ContainerSpec] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def find_container(self, name: str) -> Optional[ContainerSpec]:
        return next((c for c in self.containers if c.name == name), None)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"

from pydantic import BaseModel, Field


class CpuStats(BaseModel):
    usage: int = Field(ge=0, le=100)


class MemoryStats(BaseModel):
    total: int  # MB
    free: int  # MB
    usage: int = Field(ge=0, le=100)


class DiskStats(BaseModel):
    total: int  # GB
    used: int  # GB
    free: int  # GB


class NetworkStats(BaseModel):
    traffic: float = Field(ge=0)  # Mbps


class UptimeStats(BaseModel):
    server: str
    system: str


class StatsSnapshot(BaseModel):
    cpu: CpuStats
    memory: MemoryStats
    disk: DiskStats
    network: NetworkStats
    uptime: UptimeStats

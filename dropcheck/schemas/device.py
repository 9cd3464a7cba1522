from pydantic import BaseModel


class DeviceInfo(BaseModel):
    name: str
    signal: str


class PairedDevice(BaseModel):
    device: DeviceInfo
    status: str = "paired"
    cartridge_detected: bool = True


class WorkflowStep(BaseModel):
    title: str
    instruction: str

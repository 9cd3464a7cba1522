import random

from dropcheck.exceptions import DeviceNotFound
from dropcheck.schemas.device import DeviceInfo, PairedDevice, WorkflowStep

DEVICES = [
    DeviceInfo(name="DropCheck-A7B2", signal="strong"),
    DeviceInfo(name="DropCheck-F3C9", signal="medium"),
]

TEST_STEPS = [
    WorkflowStep(
        title="Step 1: Prepare Your Finger",
        instruction="Clean the tip of your finger with an alcohol swab. Use the provided lancet to prick the side of your fingertip.",
    ),
    WorkflowStep(
        title="Step 2: Collect the Sample",
        instruction="Gently squeeze your finger to form a drop of blood. Touch the tip of the test cuvette/strip to the blood drop until it fills.",
    ),
    WorkflowStep(
        title="Step 3: Insert the Cuvette",
        instruction="Insert the filled cuvette/strip into the DropCheck device. Make sure it is inserted correctly.",
    ),
    WorkflowStep(
        title="Step 4: Awaiting Results",
        instruction="The device is now analyzing your sample. Please wait a moment. Do not remove the cuvette.",
    ),
]

# Spread wide enough to land in every status band.
SAMPLE_BOUNDS = {
    "hemoglobin": (10.5, 16.5),
    "glucose": (65.0, 130.0),
    "crp": (0.2, 12.0),
}


class DeviceSimulator:
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def scan(self) -> list[DeviceInfo]:
        return list(DEVICES)

    def find(self, name: str) -> DeviceInfo:
        for device in DEVICES:
            if device.name == name:
                return device
        raise DeviceNotFound(name)

    def pair(self, name: str) -> PairedDevice:
        return PairedDevice(device=self.find(name))

    def read_sample(self) -> dict[str, float]:
        return {
            "hemoglobin": round(self.rng.uniform(*SAMPLE_BOUNDS["hemoglobin"]), 1),
            "glucose": float(round(self.rng.uniform(*SAMPLE_BOUNDS["glucose"]))),
            "crp": round(self.rng.uniform(*SAMPLE_BOUNDS["crp"]), 1),
        }

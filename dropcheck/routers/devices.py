from fastapi import APIRouter, Depends, HTTPException

from dropcheck.exceptions import DeviceNotFound
from dropcheck.routers.deps import get_device_simulator, get_state_store
from dropcheck.services.biomarker_evaluator import evaluate_result
from dropcheck.services.device_simulator import TEST_STEPS, DeviceSimulator
from dropcheck.services.state_store import StateStore

router = APIRouter(prefix="/api/devices", tags=["devices"])


@router.get("/scan")
def scan(simulator: DeviceSimulator = Depends(get_device_simulator)):
    return {
        "statusCode": 200,
        "message": "Devices found. Please select one to pair.",
        "data": [d.model_dump() for d in simulator.scan()],
    }


@router.get("/workflow")
def workflow():
    return {"statusCode": 200, "message": "Success", "data": [step.model_dump() for step in TEST_STEPS]}


@router.post("/{name}/pair")
def pair(name: str, simulator: DeviceSimulator = Depends(get_device_simulator)):
    try:
        paired = simulator.pair(name)
    except DeviceNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"statusCode": 200, "message": f"Paired with {name}", "data": paired.model_dump()}


@router.post("/{name}/test")
def run_test(
    name: str,
    simulator: DeviceSimulator = Depends(get_device_simulator),
    store: StateStore = Depends(get_state_store),
):
    try:
        simulator.find(name)
    except DeviceNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    sample = simulator.read_sample()
    result = store.add_result(**sample)
    return {"statusCode": 200, "message": "Test completed", "data": evaluate_result(result).model_dump(mode="json")}

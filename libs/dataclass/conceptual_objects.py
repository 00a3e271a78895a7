"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Data Structure To Locator Validation And Test Scenario Items
"""
import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Dict, Any


# ---------- Locator validation ----------

class MatchOutcome(Enum):
    NO_REFERENCE = "No reference element found"
    NO_MATCH = "Locator does not match any elements"
    EXACT_MATCH = "Locator is valid"
    AMBIGUOUS_MATCH = "Locator is ambiguous, it matches the reference element but also other elements"
    WRONG_MATCH = "Locator is invalid, it does not match the reference element"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ElementRef:
    """
    Identity token for one live DOM node. Two refs are equal only when they point to the same node.
    The key is assigned inside the page, so it never survives a navigation.
    """
    key: str


@dataclass(frozen=True)
class MatchResult:
    outcome: MatchOutcome
    match_count: int = 0

    @property
    def message(self) -> str:
        return self.outcome.message


# ---------- Snapshot ----------

@dataclass
class SnapshotEntry:
    ref: str
    role: str
    name: str = ""

    def to_line(self) -> str:
        name = f' "{self.name}"' if self.name else ""
        return f"- {self.role}{name} [ref={self.ref}]"


# ---------- Tool result ----------

@dataclass
class ToolResult:
    text: str
    code: List[str] = field(default_factory=list)
    captureSnapshot: bool = False
    waitForNetwork: bool = False


# ---------- Test scenario ----------

@dataclass
class TestScenario:
    __test__ = False  # not a pytest class

    name: str
    description: str
    steps: List[str] = field(default_factory=list)


# ---------- JSON utilities ----------

# Scenario <-> JSON
def scenario_from_json_obj(obj: Dict[str, Any]) -> TestScenario:
    required = ["name", "description", "steps"]
    for k in required:
        if k not in obj:
            raise ValueError(f"Scenario missing required field: {k}")

    if not isinstance(obj["name"], str) or not obj["name"].strip():
        raise ValueError("Scenario 'name' must be a non-empty string.")
    if not isinstance(obj["description"], str):
        raise ValueError("Scenario 'description' must be a string.")
    steps = obj["steps"]
    if not isinstance(steps, list) or not all(isinstance(s, str) for s in steps):
        raise ValueError("Scenario 'steps' must be a list of strings.")

    return TestScenario(name=obj["name"], description=obj["description"], steps=list(steps))


def scenario_from_json_str(json_str: str) -> TestScenario:
    raw = json.loads(json_str)
    if not isinstance(raw, dict):
        raise ValueError("Scenario JSON must be an object.")
    return scenario_from_json_obj(raw)


def scenario_to_json_dict(scenario: TestScenario) -> Dict[str, Any]:
    return asdict(scenario)


def scenario_to_json_str(scenario: TestScenario, indent: int = 2) -> str:
    return json.dumps(scenario_to_json_dict(scenario), ensure_ascii=False, indent=indent)


def snapshot_entry_from_json_obj(obj: Dict[str, Any]) -> Optional[SnapshotEntry]:
    ref = obj.get("ref")
    if not ref:
        return None
    return SnapshotEntry(ref=str(ref), role=str(obj.get("role") or "generic"), name=str(obj.get("name") or ""))

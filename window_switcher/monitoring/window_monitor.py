"""Window state monitoring (minimized flags) using JavaScript for Automation."""

import json
from typing import Any, Dict, List, Optional

from ..models import WindowStates
from ..utils import AppleScriptExecutor

# One batched AXMinimized read per process. Window numbers are read the same way
# so the merge can join on them instead of on window position.
# Returns { bundleId: { minimized: [bool, ...], numbers: [int|null, ...] } }.
MINIMIZED_SCRIPT = '''(() => {
  var se = Application("System Events");
  var procs = se.processes.whose({ backgroundOnly: false });
  var bundleIds = procs.bundleIdentifier();
  var count = bundleIds.length;
  var result = {};

  for (var i = 0; i < count; i++) {
    if (!bundleIds[i]) continue;
    try {
      var vals = procs[i].windows.attributes.byName("AXMinimized").value();
      if (vals && vals.length > 0) {
        var arr = [];
        for (var j = 0; j < vals.length; j++) arr.push(vals[j] === true);
        var nums = [];
        try {
          var raw = procs[i].windows.attributes.byName("AXWindowNumber").value();
          for (var k = 0; k < raw.length; k++) nums.push(typeof raw[k] === "number" ? raw[k] : null);
        } catch (e) {}
        var entry = { minimized: arr };
        if (nums.length === arr.length) entry.numbers = nums;
        result[bundleIds[i]] = entry;
      }
    } catch (e) {}
  }
  return JSON.stringify(result);
})()'''


def _parse_flags(raw: Any) -> Optional[List[bool]]:
    if not isinstance(raw, list):
        return None
    return [value is True for value in raw]


def _parse_numbers(raw: Any, expected: int) -> Optional[List[Optional[int]]]:
    if not isinstance(raw, list) or len(raw) != expected:
        return None
    return [n if isinstance(n, int) and not isinstance(n, bool) else None for n in raw]


def parse_window_states(payload: Any) -> WindowStates:
    """
    Parse the slow query's JSON payload.

    Accepts both the current shape ({bundleId: {minimized, numbers}}) and the
    older one ({bundleId: [bool, ...]}). Entries that fit neither are dropped.

    Args:
        payload: Decoded JSON value

    Returns:
        WindowStates (empty if payload is not an object)
    """
    states = WindowStates()
    if not isinstance(payload, dict):
        return states

    for bundle_id, entry in payload.items():
        if not isinstance(bundle_id, str) or not bundle_id:
            continue
        if isinstance(entry, dict):
            flags = _parse_flags(entry.get("minimized"))
            if flags is None:
                continue
            states.minimized[bundle_id] = flags
            numbers = _parse_numbers(entry.get("numbers"), len(flags))
            if numbers is not None:
                states.window_numbers[bundle_id] = numbers
        else:
            flags = _parse_flags(entry)
            if flags is not None:
                states.minimized[bundle_id] = flags

    return states


def query_window_states(executor: Optional[AppleScriptExecutor] = None) -> WindowStates:
    """
    Get minimized flags (and window numbers where readable) for every window.

    This is the slow query: AXMinimized costs one accessibility read per
    window. Processes that deny attribute access or have no windows are left
    out rather than failing the whole call.

    Args:
        executor: AppleScript executor to use

    Returns:
        WindowStates (empty on any failure)
    """
    executor = executor or AppleScriptExecutor()
    success, stdout, stderr = executor.execute_javascript(MINIMIZED_SCRIPT)

    if not success:
        print(f"Warning: Failed to read minimized windows: {stderr}")
        return WindowStates()
    if not stdout:
        return WindowStates()

    try:
        payload = json.loads(stdout)
    except json.JSONDecodeError as e:
        print(f"Warning: Minimized windows query returned malformed JSON: {e}")
        return WindowStates()

    return parse_window_states(payload)


def query_minimized_status(executor: Optional[AppleScriptExecutor] = None) -> Dict[str, List[bool]]:
    """
    Get minimized flags per bundle id.

    Each list is positionally aligned with the window indices of the fast
    query for the same bundle id.

    Args:
        executor: AppleScript executor to use

    Returns:
        Mapping of bundle id to minimized flags (empty on failure)
    """
    return query_window_states(executor).minimized

"""Running application monitoring using JavaScript for Automation."""

import json
from typing import List, Optional

from ..models import App, apps_from_list
from ..utils import AppleScriptExecutor

# Batch process properties + per-window metadata, resolve app paths via NSWorkspace.
# AXMinimized is skipped here (one expensive read per window); the slow query covers it.
FAST_SCRIPT = '''(() => {
  ObjC.import("AppKit");
  var ws = $.NSWorkspace.sharedWorkspace;
  var se = Application("System Events");
  var procs = se.processes.whose({ backgroundOnly: false });
  var names = procs.name();
  var bundleIds = procs.bundleIdentifier();
  var frontmosts = procs.frontmost();
  var count = names.length;

  var results = [];
  for (var i = 0; i < count; i++) {
    if (!bundleIds[i]) continue;

    var path = "";
    try {
      var url = ws.URLForApplicationWithBundleIdentifier(bundleIds[i]);
      if (url && url.path) path = ObjC.unwrap(url.path);
    } catch (e) {}

    var procWindows = [];
    try { procWindows = procs[i].windows(); } catch (e) {}
    var windows = [];
    for (var j = 0; j < procWindows.length; j++) {
      var win = procWindows[j];
      var title = "";
      var num = null;
      try { title = win.name() || ""; } catch (e) {}
      try { num = win.attributes.byName("AXWindowNumber").value(); } catch (e) {}
      var entry = { title: title, minimized: false, index: j };
      if (typeof num === "number") entry.windowNumber = num;
      windows.push(entry);
    }
    results.push({
      name: names[i],
      bundleId: bundleIds[i],
      frontmost: frontmosts[i] === true,
      appPath: path || "",
      windows: windows
    });
  }
  return JSON.stringify(results);
})()'''


def query_running_apps(executor: Optional[AppleScriptExecutor] = None) -> List[App]:
    """
    Get running, non-background applications with their windows.

    All process-level reads happen in one osascript round-trip. Processes
    without a bundle identifier are skipped; windows come back with
    minimized=False until the slow query is merged in.

    Args:
        executor: AppleScript executor to use

    Returns:
        List of apps. An empty list means "unknown", not "nothing running":
        callers fall back to the cache.
    """
    executor = executor or AppleScriptExecutor()
    success, stdout, stderr = executor.execute_javascript(FAST_SCRIPT)

    if not success:
        print(f"Warning: Failed to list running apps: {stderr}")
        return []
    if not stdout:
        return []

    try:
        records = json.loads(stdout)
    except json.JSONDecodeError as e:
        print(f"Warning: Running apps query returned malformed JSON: {e}")
        return []

    return apps_from_list(records)

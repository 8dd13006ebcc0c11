"""
JavaScript evaluated inside the Miro board page.

`window.miro` is the board's client SDK; `window.cmd` is the web client's
internal command bus, which is the only place the vector export is reachable.
"""

# Shown instead of the board when the visitor has no access.
AUTH_PROMPT_SELECTOR = '[data-testid="signup-popup-container"]'

RUNTIME_READY_SCRIPT = """
() => {
  try {
    return typeof window.miro !== "undefined" && typeof window.miro.board !== "undefined";
  } catch (e) {
    return false;
  }
}
"""

# Records are SDK class instances; the JSON round trip leaves plain data only.
GET_BOARD_OBJECTS_SCRIPT = """
async (filter) => {
  const objects = await window.miro.board.get(filter);
  return JSON.parse(JSON.stringify(objects));
}
"""

EXPORT_VECTOR_SCRIPT = """
async (objectIds) => {
  await window.miro.board.deselect();
  for (const id of objectIds) {
    await window.miro.board.select({ id });
  }
  return await window.cmd.board.api.export.makeVector();
}
"""

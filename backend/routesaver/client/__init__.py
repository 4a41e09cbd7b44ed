"""Client Layer — API client, persisted session and the map/route editor controller.

Invariants:
    - Client code talks to the server only through RouteSaverClient
    - Editor state lives in one EditorModel owned by MapController
"""

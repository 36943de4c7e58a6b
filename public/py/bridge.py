# public/py/bridge.py
import json
import logging

import structlog

from graph import Graph


def configure_logging(level: str = "INFO"):
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _pt(p):
    return {"x": float(p.x()), "y": float(p.y())} if p is not None else None


def _state_dict(g: Graph):
    verts = []
    for v in g.getVertices():
        p = v.getPosition()
        verts.append(
            {
                "index": v.getIndex(),
                "id": v.getId(),
                "x": float(p.x()),
                "y": float(p.y()),
                "visible": bool(v.isVisible()),
            }
        )
    return {
        "vertices": verts,
        "edges": [list(e.indices()) for e in g.getEdges()],
        "periphery": list(g.getPeriphery()),
        "selection": list(g.getSelection()),
        "segment": list(g.getSegmentVertices()),
        "manualMode": g.isManualMode(),
        "meta": g.get_stats(),
    }


def _result_dict(res):
    out = {
        "ok": bool(res.ok),
        "message": res.message,
        "kind": res.kind.value if res.kind is not None else None,
    }
    if res.ok:
        out["vertexId"] = res.vertexId
        out["index"] = res.vertexIndex
        out["segmentSize"] = res.segmentSize
        out["position"] = _pt(res.position)
    else:
        out["edges"] = [list(e) for e in res.edges] if res.edges else None
    return out


class Bridge:
    """
    JSON command surface for the UI worker. Every command returns a JSON
    string with the outcome and the full state to draw.
    """

    def __init__(self, graph: Graph = None):
        self.graph = graph if graph is not None else Graph()

    def _reply(self, res, **extra):
        out = _result_dict(res)
        out.update(extra)
        out["state"] = _state_dict(self.graph)
        return json.dumps(out)

    # ------------- Commands exported to the worker -------------
    def reset(self):
        return self._reply(self.graph.resetToTriangle())

    def add_random(self):
        return self._reply(self.graph.insertRandomSegment())

    def select(self, index: int):
        return self._reply(self.graph.beginManualSelection(int(index)))

    def toggle_select(self, index: int):
        return self._reply(self.graph.toggleSelection(int(index)))

    def clear_selection(self):
        return self._reply(self.graph.clearSelection())

    def set_manual_mode(self, on: bool):
        return self._reply(self.graph.setManualMode(bool(on)))

    def go_to(self, m: int):
        return self._reply(self.graph.setVisibilityThreshold(int(m)))

    def integrity(self):
        return self._reply(self.graph.computeIntegrityStatus())

    def refresh(self):
        return self._reply(self.graph.refreshPeriphery())

    def preview(self, segment=None):
        pos = self.graph.previewPlacement(segment)
        return json.dumps({"ok": pos is not None, "position": _pt(pos)})

    def hit_test(self, x: float, y: float):
        return json.dumps({"index": self.graph.findVertexAt(float(x), float(y))})

    def get_state(self):
        return json.dumps(_state_dict(self.graph))

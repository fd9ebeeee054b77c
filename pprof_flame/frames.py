"""
Data model shared by the parsers, the layout engine and the exporters.
"""


class Frame:
    """One node of the call tree: a function name and the samples under it."""

    def __init__(self, name: str, weight=0, children=None):
        self.name = name
        self.weight = weight
        self.children = list(children) if children else []
        self._index = {}
        for child in self.children:
            self._index.setdefault(child.name, child)

    def child(self, name: str):
        """Return the child named `name`, creating it with weight 0 if absent."""
        node = self._index.get(name)
        if node is None:
            node = Frame(name)
            self.children.append(node)
            self._index[name] = node
        return node

    def add(self, node: "Frame") -> "Frame":
        """Append `node` as the last child, keeping duplicate names as separate nodes."""
        self.children.append(node)
        self._index.setdefault(node.name, node)
        return node

    def walk(self):
        """Yield this frame and every descendant, pre-order."""
        stack = [self]
        while stack:
            frame = stack.pop()
            yield frame
            stack.extend(reversed(frame.children))

    def to_dict(self) -> dict:
        out = {}
        stack = [(self, out)]
        while stack:
            frame, d = stack.pop()
            d["name"] = frame.name
            d["value"] = frame.weight
            if frame.children:
                d["children"] = [{} for _ in frame.children]
                stack.extend(zip(frame.children, d["children"]))
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "Frame":
        """Rebuild a tree from its {"name", "value", "children"} form."""
        root = cls(data["name"], data.get("value", 0))
        stack = [(root, data)]
        while stack:
            frame, d = stack.pop()
            for c in d.get("children", ()):
                stack.append((frame.add(cls(c["name"], c.get("value", 0))), c))
        return root

    def __repr__(self):
        return f"Frame({self.name!r}, weight={self.weight}, children={len(self.children)})"


class LayoutRectangle:
    __slots__ = ("frame", "depth", "x", "width")

    def __init__(self, frame: Frame, depth: int, x: float, width: float):
        self.frame = frame
        self.depth = depth
        self.x = x
        self.width = width

    def to_dict(self) -> dict:
        return {
            "name": self.frame.name,
            "value": self.frame.weight,
            "depth": self.depth,
            "x": self.x,
            "width": self.width,
        }

    def __repr__(self):
        return (
            f"LayoutRectangle({self.frame.name!r}, depth={self.depth}, "
            f"x={self.x:.4f}, width={self.width:.4f})"
        )


class TopFunctionEntry:
    __slots__ = ("name", "percentage", "samples")

    def __init__(self, name: str, percentage: float, samples: int):
        self.name = name
        self.percentage = percentage
        self.samples = samples

    def to_dict(self) -> dict:
        return {"name": self.name, "percentage": self.percentage, "samples": self.samples}

    def __eq__(self, other):
        if not isinstance(other, TopFunctionEntry):
            return NotImplemented
        return (self.name, self.percentage, self.samples) == (
            other.name,
            other.percentage,
            other.samples,
        )

    def __repr__(self):
        return f"TopFunctionEntry({self.name!r}, {self.percentage}%, {self.samples})"


class ProfileData:
    """Everything one profiling request hands back to its caller."""

    def __init__(
        self,
        name: str,
        duration: float,
        sample_count: int,
        top_functions,
        flamegraph: Frame,
        raw_profile: str = "",
        kind: str = "cpu",
        demo: bool = False,
    ):
        self.name = name
        self.duration = duration
        self.sample_count = sample_count
        self.top_functions = list(top_functions)
        self.flamegraph = flamegraph
        self.raw_profile = raw_profile
        self.kind = kind
        self.demo = demo

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "duration": self.duration,
            "sampleCount": self.sample_count,
            "profileType": self.kind,
            "demo": self.demo,
            "topFunctions": [f.to_dict() for f in self.top_functions],
            "flamegraphData": self.flamegraph.to_dict(),
            "rawProfile": self.raw_profile,
        }

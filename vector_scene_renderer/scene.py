#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import itertools
import logging
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .errors import CyclicGraphError, UnknownNodeError
from .math_utils import Mat4, Vec3
from .mesh import Mesh
from .node import Node, SceneRoot

logger = logging.getLogger(__name__)

NodeRef = Union[Node, int]


class Scene:
    """
    Arena of scene graph nodes addressed by stable integer ids.

    The root node (kind Scene) is created with the arena. Each node is owned
    by exactly one parent; `add_child` reparents and refuses to create
    cycles. Nodes detached with `remove_child` stay in the arena but are not
    reachable from the root, so they are not rendered until re-attached.

    World transforms are never cached: `compute_world_transform` and
    `walk_world` fold the chain from the root on every call.
    """

    def __init__(self, name: str = 'Scene'):
        self._nodes: Dict[int, Node] = {}
        self._ids = itertools.count()
        self.root = self._register(SceneRoot(name))

    def __len__(self):
        return len(self._nodes)

    def __contains__(self, ref) -> bool:
        node_id = ref.id if isinstance(ref, Node) else ref
        return node_id in self._nodes

    # ── Registration ────────────────────────────────────────────────────
    def _register(self, node: Node) -> Node:
        if node.id is not None:
            if self._nodes.get(node.id) is node:
                return node
            raise ValueError(f"{node!r} is already registered in another scene")
        node.id = next(self._ids)
        self._nodes[node.id] = node
        return node

    def node(self, ref: NodeRef) -> Node:
        """Resolve a node or node id to the registered node."""
        node_id = ref.id if isinstance(ref, Node) else ref
        try:
            node = self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None
        if isinstance(ref, Node) and node is not ref:
            raise UnknownNodeError(node_id)
        return node

    def add(self, node: Node, parent: Optional[NodeRef] = None) -> Node:
        """Register a node (if new) and attach it under parent (default: root)."""
        self._register(node)
        self.add_child(self.root if parent is None else parent, node)
        return node

    def create_node(self, name: str = 'Object3D', parent: Optional[NodeRef] = None) -> Node:
        return self.add(Node(name), parent)

    def create_mesh(self, vertices, faces, materials=None, name: str = 'Mesh',
                    parent: Optional[NodeRef] = None, **kwargs) -> Mesh:
        return self.add(Mesh(vertices, faces, materials, name=name, **kwargs), parent)

    # ── Structure ───────────────────────────────────────────────────────
    def add_child(self, parent: NodeRef, child: NodeRef) -> Node:
        """
        Attach child under parent, detaching it from any previous parent.

        Raises CyclicGraphError if child is parent itself or one of its
        ancestors.
        """
        parent = self.node(parent)
        child = self.node(child)
        if child is parent or child.id in self._ancestor_ids(parent):
            raise CyclicGraphError(
                f"cannot add {child!r} under {parent!r}: it would become its own ancestor")

        if child.parent is not None:
            if child.parent == parent.id:
                return child
            old_parent = self._nodes[child.parent]
            old_parent.children.remove(child.id)
            logger.debug("Reparenting %r from %r to %r", child, old_parent, parent)

        child.parent = parent.id
        parent.children.append(child.id)
        return child

    def remove_child(self, parent: NodeRef, child: NodeRef) -> Node:
        """Detach child from parent; the child subtree stays in the arena."""
        parent = self.node(parent)
        child = self.node(child)
        if child.parent != parent.id:
            raise ValueError(f"{child!r} is not a child of {parent!r}")
        parent.children.remove(child.id)
        child.parent = None
        return child

    def remove_node(self, ref: NodeRef) -> List[Node]:
        """Detach a node and drop its whole subtree from the arena."""
        node = self.node(ref)
        if node is self.root:
            raise ValueError("the scene root cannot be removed")
        if node.parent is not None:
            self.remove_child(node.parent, node)
        removed = list(self.traverse(node, include_hidden=True))
        for n in removed:
            del self._nodes[n.id]
            n.id = None
            n.parent = None
            n.children = []
        return removed

    def parent_of(self, ref: NodeRef) -> Optional[Node]:
        node = self.node(ref)
        return None if node.parent is None else self._nodes[node.parent]

    def children_of(self, ref: NodeRef) -> List[Node]:
        return [self._nodes[cid] for cid in self.node(ref).children]

    def _ancestor_ids(self, node: Node) -> List[int]:
        ids = []
        current = node.parent
        while current is not None:
            ids.append(current)
            current = self._nodes[current].parent
        return ids

    def ancestors(self, ref: NodeRef) -> List[Node]:
        """Ancestors from the immediate parent up to the topmost node."""
        return [self._nodes[i] for i in self._ancestor_ids(self.node(ref))]

    def find(self, name: str) -> Optional[Node]:
        """First node reachable from the root with the given name."""
        for node in self.traverse(include_hidden=True):
            if node.name == name:
                return node
        return None

    def traverse(self, start: Optional[NodeRef] = None,
                 include_hidden: bool = False) -> Iterator[Node]:
        """Depth-first pre-order walk; hidden subtrees are skipped by default."""
        for node, _ in self._walk(start, None, include_hidden):
            yield node

    # ── Transforms ──────────────────────────────────────────────────────
    def set_transform(self, ref: NodeRef, position=None, rotation=None, scale=None) -> Node:
        node = self.node(ref)
        if position is not None:
            node.transform.position = Vec3.of(position)
        if rotation is not None:
            node.transform.rotation = Vec3.of(rotation)
        if scale is not None:
            node.transform.scale = Vec3.of(scale)
        return node

    def compute_world_transform(self, ref: NodeRef) -> Mat4:
        """Compose local matrices from the topmost ancestor down to the node."""
        node = self.node(ref)
        world = Mat4.identity()
        for ancestor in reversed(self.ancestors(node)):
            world = world @ ancestor.transform.matrix()
        return world @ node.transform.matrix()

    def walk_world(self, start: Optional[NodeRef] = None,
                   include_hidden: bool = False) -> Iterator[Tuple[Node, Mat4]]:
        """
        Depth-first walk yielding (node, world_matrix).

        Each world matrix is composed once per walk, from the parent's.
        """
        start_node = self.root if start is None else self.node(start)
        parent_world = (Mat4.identity() if start_node.parent is None
                        else self.compute_world_transform(start_node.parent))
        return self._walk(start_node, parent_world, include_hidden)

    def _walk(self, start, parent_world, include_hidden):
        start_node = self.root if start is None else self.node(start)
        stack = [(start_node, parent_world)]
        while stack:
            node, pw = stack.pop()
            if not node.visible and not include_hidden:
                continue
            world = None
            if pw is not None:
                world = pw @ node.transform.matrix()
            yield node, world
            for cid in reversed(node.children):
                stack.append((self._nodes[cid], world))

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from coursegraph.core.errors import CircularDependencyError
from coursegraph.models.course import Course


@dataclass
class PrereqGraph:
    nodes: list[str]
    edges: dict[str, list[str]]  # prereq -> dependents
    prereqs: dict[str, list[str]]  # course -> prereqs present in the catalog
    dangling: dict[str, list[str]] = field(default_factory=dict)  # course -> unknown prereq ids


def build_graph(courses: Iterable[Course]) -> PrereqGraph:
    courses = list(courses)
    nodes = [course.course_id for course in courses]
    known = set(nodes)
    edges: dict[str, list[str]] = {node: [] for node in nodes}
    prereqs: dict[str, list[str]] = {node: [] for node in nodes}
    dangling: dict[str, list[str]] = {}

    for course in courses:
        for req in course.prerequisites:
            if req not in known:
                dangling.setdefault(course.course_id, []).append(req)
                continue
            # A course listing the same prereq twice is still one edge
            if req in prereqs[course.course_id]:
                continue
            prereqs[course.course_id].append(req)
            edges[req].append(course.course_id)

    return PrereqGraph(nodes=nodes, edges=edges, prereqs=prereqs, dangling=dangling)


def topo_sort(graph: PrereqGraph) -> list[str]:
    indegree = {n: len(graph.prereqs.get(n, ())) for n in graph.nodes}

    queue = deque([n for n in graph.nodes if indegree[n] == 0])
    order: list[str] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for nxt in graph.edges.get(node, ()):
            indegree[nxt] -= 1
            if indegree[nxt] == 0:
                queue.append(nxt)

    if len(order) != len(graph.nodes):
        placed = set(order)
        raise CircularDependencyError(
            remaining=[n for n in graph.nodes if n not in placed],
        )

    return order

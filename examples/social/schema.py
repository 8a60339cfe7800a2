"""Graph schema of a small professional network."""

import neoform as nf

person = nf.NodeType(
    label="Person",
    description="Someone with a profile in the network",
    properties=[
        nf.Property(name="id", type=nf.PropertyType.STRING, required=True, unique=True),
        nf.Property(name="name", type=nf.PropertyType.STRING, required=True),
        nf.Property(name="email", type=nf.PropertyType.STRING),
        nf.Property(name="bio", type=nf.PropertyType.STRING),
        nf.Property(name="embedding", type=nf.PropertyType.LIST_FLOAT),
    ],
    indexes=[
        nf.Index(properties=["name"]),
        nf.Index(name="person_bio", type=nf.IndexType.FULLTEXT, properties=["name", "bio"]),
        nf.Index(
            name="person_embedding",
            type=nf.IndexType.VECTOR,
            properties=["embedding"],
            options={"dimensions": 256, "similarity_function": "cosine"},
        ),
    ],
)


class Company(nf.NodeType):
    label: str = "Company"
    description: str = "An employer"
    properties: list[nf.Property] = [
        nf.Property(name="name", type=nf.PropertyType.STRING, required=True),
        nf.Property(name="founded", type=nf.PropertyType.DATE),
    ]
    constraints: list[nf.Constraint] = [
        nf.Constraint(type=nf.ConstraintType.NODE_KEY, properties=["name"]),
    ]


works_for = nf.RelationshipType(
    label="WORKS_FOR",
    source=person,
    target=Company,
    cardinality=nf.Cardinality.MANY_TO_ONE,
    properties=[nf.Property(name="since", type=nf.PropertyType.DATE)],
)

knows = nf.RelationshipType(
    label="KNOWS",
    source=person,
    target=person,
    properties=[nf.Property(name="weight", type=nf.PropertyType.FLOAT, default_value=1.0)],
)

network = nf.Schema(
    name="network",
    description="People, their employers and who knows whom",
    node_types=[person, Company],
    relationship_types=[works_for, knows],
    agent_context="Person.id is the stable identifier; names are not unique.",
)

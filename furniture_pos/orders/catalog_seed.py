"""Default furniture catalog used when no overrides are stored."""

from .domain import Category, Product

CATEGORIES = (
    Category(id="cat1", name="Beds", image_url="https://picsum.photos/seed/beds/400/400"),
    Category(id="cat2", name="Dressing Tables", image_url="https://picsum.photos/seed/dressing/400/400"),
    Category(id="cat3", name="Sofas", image_url="https://picsum.photos/seed/sofas/400/400"),
    Category(id="cat4", name="Showcases", image_url="https://picsum.photos/seed/showcases/400/400"),
    Category(id="cat5", name="Dining", image_url="https://picsum.photos/seed/dining/400/400"),
    Category(id="cat6", name="Chairs", image_url="https://picsum.photos/seed/chairs/400/400"),
    Category(id="cat7", name="Wardrobes", image_url="https://picsum.photos/seed/wardrobes/400/400"),
    Category(id="cat8", name="Kids", image_url="https://picsum.photos/seed/kids/400/400"),
    Category(id="cat9", name="Office", image_url="https://picsum.photos/seed/office/400/400"),
    Category(id="cat10", name="Decor", image_url="https://picsum.photos/seed/decor/400/400"),
)

PRODUCTS = (
    Product(
        id="prod1",
        sku="BED-001",
        name="Classic King Bed",
        category_id="cat1",
        description="King size wooden bed with a classic finish.",
        base_price=85000,
        image_url="https://picsum.photos/seed/bed001/600/600",
    ),
    Product(
        id="prod2",
        sku="BED-002",
        name="Modern Queen Bed",
        category_id="cat1",
        description="Upholstered queen bed with a modern design.",
        base_price=72000,
        image_url="https://picsum.photos/seed/bed002/600/600",
    ),
    Product(
        id="prod19",
        sku="BED-003",
        name="Bunk Bed",
        category_id="cat1",
        description="Space saving bunk bed for kids.",
        base_price=45000,
        image_url="https://picsum.photos/seed/bed003/600/600",
    ),
    Product(
        id="prod3",
        sku="DRESS-001",
        name="Silver Vanity Table",
        category_id="cat2",
        description="Elegant dressing table with a large mirror.",
        base_price=18000,
        image_url="https://picsum.photos/seed/dress001/600/600",
    ),
    Product(
        id="prod4",
        sku="DRESS-002",
        name="Compact Dresser",
        category_id="cat2",
        description="A compact dresser with multiple drawers.",
        base_price=15000,
        image_url="https://picsum.photos/seed/dress002/600/600",
    ),
    Product(
        id="prod5",
        sku="SOFA-001",
        name="5-Seater L-Shape Sofa",
        category_id="cat3",
        description="Comfortable fabric L-shape sofa for living rooms.",
        base_price=65000,
        image_url="https://picsum.photos/seed/sofa001/600/600",
    ),
    Product(
        id="prod6",
        sku="SOFA-002",
        name="Leather 3-Seater",
        category_id="cat3",
        description="Premium leather sofa.",
        base_price=95000,
        image_url="https://picsum.photos/seed/sofa002/600/600",
    ),
    Product(
        id="prod7",
        sku="SHOW-001",
        name="Glass Display Cabinet",
        category_id="cat4",
        description="Tall glass cabinet to display your valuables.",
        base_price=22000,
        image_url="https://picsum.photos/seed/show001/600/600",
    ),
    Product(
        id="prod8",
        sku="DIN-001",
        name="6-Seater Dining Table",
        category_id="cat5",
        description="Wooden dining table with 6 matching chairs.",
        base_price=55000,
        image_url="https://picsum.photos/seed/din001/600/600",
    ),
    Product(
        id="prod9",
        sku="DIN-002",
        name="4-Seater Round Table",
        category_id="cat5",
        description="Glass top round table, perfect for small families.",
        base_price=38000,
        image_url="https://picsum.photos/seed/din002/600/600",
    ),
    Product(
        id="prod10",
        sku="CHR-001",
        name="Accent Chair",
        category_id="cat6",
        description="A stylish accent chair to complement any room.",
        base_price=12000,
        image_url="https://picsum.photos/seed/chr001/600/600",
    ),
    Product(
        id="prod11",
        sku="CHR-002",
        name="Rocking Chair",
        category_id="cat6",
        description="Classic wooden rocking chair.",
        base_price=9000,
        image_url="https://picsum.photos/seed/chr002/600/600",
    ),
    Product(
        id="prod12",
        sku="WARD-001",
        name="3-Door Wardrobe",
        category_id="cat7",
        description="Spacious 3-door wardrobe with mirror.",
        base_price=48000,
        image_url="https://picsum.photos/seed/ward001/600/600",
    ),
    Product(
        id="prod13",
        sku="WARD-002",
        name="Sliding Door Closet",
        category_id="cat7",
        description="Modern closet with smooth sliding doors.",
        base_price=62000,
        image_url="https://picsum.photos/seed/ward002/600/600",
    ),
    Product(
        id="prod14",
        sku="KID-001",
        name="Kids Study Table",
        category_id="cat8",
        description="Colorful and durable study table for children.",
        base_price=7500,
        image_url="https://picsum.photos/seed/kid001/600/600",
    ),
    Product(
        id="prod15",
        sku="KID-002",
        name="Toy Storage Box",
        category_id="cat8",
        description="Large capacity toy storage box.",
        base_price=4000,
        image_url="https://picsum.photos/seed/kid002/600/600",
    ),
    Product(
        id="prod16",
        sku="OFF-001",
        name="Executive Office Desk",
        category_id="cat9",
        description="Large office desk with drawers.",
        base_price=35000,
        image_url="https://picsum.photos/seed/off001/600/600",
    ),
    Product(
        id="prod17",
        sku="OFF-002",
        name="Ergonomic Office Chair",
        category_id="cat9",
        description="Comfortable chair for long working hours.",
        base_price=18000,
        image_url="https://picsum.photos/seed/off002/600/600",
    ),
    Product(
        id="prod18",
        sku="DEC-001",
        name="Wall Mirror",
        category_id="cat10",
        description="Decorative wall mirror with ornate frame.",
        base_price=6000,
        image_url="https://picsum.photos/seed/dec001/600/600",
    ),
)

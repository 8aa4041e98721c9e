from life3d.cell import CubeCell


def full_grid(dims, health_ticks=None):
    """Fresh cells for every index of a dims-cube, in flattening order."""
    cells = []
    for i in range(dims):
        for j in range(dims):
            for k in range(dims):
                cell = CubeCell.from_index((i, j, k))
                if health_ticks is not None:
                    cell.health.health_ticks = health_ticks
                cells.append(cell)
    return cells

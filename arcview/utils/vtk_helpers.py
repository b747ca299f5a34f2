import vtk

from arcview.core.camera_state import CameraPose


def apply_pose_to_vtk_camera(camera: vtk.vtkCamera, pose: CameraPose) -> None:
    """
    Copy an arcball pose into a VTK camera.

    The focal point is placed one orbit distance along the view direction so
    VTK's own dolly/clipping logic sees the real pivot distance.
    """
    camera.SetPosition(*pose.eye)
    camera.SetFocalPoint(*pose.focal_point)
    camera.SetViewUp(*pose.up)


def get_camera_pose(camera: vtk.vtkCamera) -> tuple[tuple, tuple, tuple]:
    """Return (position, focal point, view up) of a VTK camera."""
    return (
        tuple(camera.GetPosition()),
        tuple(camera.GetFocalPoint()),
        tuple(camera.GetViewUp()),
    )


def create_demo_actors() -> list[vtk.vtkProp]:
    """
    Build a small scene to orbit: a shaded cone at the origin and axes.
    """
    cone = vtk.vtkConeSource()
    cone.SetResolution(32)
    cone.SetHeight(2.0)
    cone.SetRadius(0.8)

    mapper = vtk.vtkPolyDataMapper()
    mapper.SetInputConnection(cone.GetOutputPort())

    actor = vtk.vtkActor()
    actor.SetMapper(mapper)
    actor.GetProperty().SetColor(0.85, 0.55, 0.3)

    axes = vtk.vtkAxesActor()
    axes.SetTotalLength(1.5, 1.5, 1.5)
    axes.SetAxisLabels(False)

    return [actor, axes]

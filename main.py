import argparse
import logging
from multiprocessing import Process, Manager

import pygame

import constants
from constants import BLACK, FPS, HEIGHT, WHITE, WIDTH
from clothsim.distance import exact_dist, approx_dist
from clothsim.serialization import save_cloth, load_cloth
from clothsim.world import World
import gui_controller as gui_ctrl

logger = logging.getLogger("clothsim")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Interactive Verlet cloth')
    parser.add_argument('--cols', type=int, default=constants.CLOTH_COLS,
                        help=f'Particles per row (default: {constants.CLOTH_COLS})')
    parser.add_argument('--rows', type=int, default=constants.CLOTH_ROWS,
                        help=f'Particles per column (default: {constants.CLOTH_ROWS})')
    parser.add_argument('--spacing', type=float, default=constants.REST_LENGTH,
                        help=f'Grid spacing / rest length (default: {constants.REST_LENGTH})')
    parser.add_argument('--iterations', type=int, default=constants.CONSTRAINT_ITERATIONS,
                        help=f'Relaxation passes per frame (default: {constants.CONSTRAINT_ITERATIONS})')
    parser.add_argument('--gravity', type=float, default=constants.GRAVITY,
                        help=f'Vertical acceleration, negative is down (default: {constants.GRAVITY})')
    parser.add_argument('--dt', type=float, default=constants.DELTA_TIME,
                        help=f'Fixed timestep (default: {constants.DELTA_TIME})')
    parser.add_argument('--exact-distance', action='store_true',
                        help='Use the Euclidean norm instead of the fast approximation')
    parser.add_argument('--pick-radius', type=float, default=constants.PICK_RADIUS,
                        help='Only grab particles within this distance (default: unlimited)')
    parser.add_argument('--tear-on-press', action='store_true',
                        help='Also tear on mouse press, not only while moving')
    parser.add_argument('--snapshot', type=str, default=constants.SNAPSHOT_FILE,
                        help=f'Snapshot file for P/L (default: {constants.SNAPSHOT_FILE})')
    parser.add_argument('--gui', action='store_true',
                        help='Open the DearPyGui control panel')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def cloth_options(args):
    return {
        'origin': (constants.OFFSET_X, constants.OFFSET_Y),
        'width': args.cols,
        'height': args.rows,
        'rest_length': args.spacing,
        'gravity': args.gravity,
        'delta_time': args.dt,
        'iterations': args.iterations,
        'distance': exact_dist if args.exact_distance else approx_dist,
        'pick_radius': args.pick_radius,
    }


def _start_gui():
    mgr = Manager()
    shared = mgr.dict()
    shared['tear_mode'] = False
    shared['toggle_pause'] = False
    shared['reset_world'] = False
    shared['save'] = False
    shared['load'] = False
    shared['status'] = ''
    shared['__exit__'] = False
    proc = Process(target=gui_ctrl.run_gui, args=(shared,), daemon=True)
    proc.start()
    return mgr, shared, proc


def _save(world, filename):
    try:
        save_cloth(world.cloth, filename)
    except OSError as e:
        logger.error("could not save %s: %s", filename, e)


def _load(world, filename):
    try:
        world.replace_cloth(load_cloth(filename))
    except (OSError, ValueError, KeyError) as e:
        logger.error("could not load %s: %s", filename, e)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Cloth")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 24)

    world = World(WIDTH, HEIGHT, cloth_options=cloth_options(args), tear_on_press=args.tear_on_press)
    controller = world.controller

    shared = None
    gui_proc = None
    if args.gui:
        _mgr, shared, gui_proc = _start_gui()

    running = True
    paused = False

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                world.pointer_down(event.pos)
            elif event.type == pygame.MOUSEMOTION:
                world.pointer_move(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                world.pointer_up()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_t:
                    controller.set_tear_mode(True)
                elif event.key == pygame.K_a:
                    controller.set_anchor_intent(True)
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_r:
                    world.reset()
                elif event.key == pygame.K_v:
                    world.show_particles = not world.show_particles
                elif event.key == pygame.K_p:
                    _save(world, args.snapshot)
                elif event.key == pygame.K_l:
                    _load(world, args.snapshot)
                elif event.key == pygame.K_ESCAPE:
                    running = False
            elif event.type == pygame.KEYUP and event.key == pygame.K_t:
                controller.set_tear_mode(False)

        # --- Handle GUI updates (polled between frames) ---
        if shared is not None:
            if shared.get('tear_mode', False):
                controller.set_tear_mode(True)
                shared['tear_mode'] = False
            if shared.get('toggle_pause', False):
                paused = not paused
                shared['toggle_pause'] = False
            if shared.get('reset_world', False):
                world.reset()
                shared['reset_world'] = False
            if shared.get('save', False):
                _save(world, args.snapshot)
                shared['save'] = False
            if shared.get('load', False):
                _load(world, args.snapshot)
                shared['load'] = False
            if shared.get('__exit__', False):
                running = False
            shared['status'] = (f"constraints={len(world.cloth.constraints)}, "
                                f"anchors={len(world.cloth.anchors)}, mode={controller.state}")

        # --- Update ---
        if not paused:
            world.update()

        # --- Draw ---
        screen.fill(WHITE)
        world.draw(screen)

        if paused:
            pause_text = font.render("PAUSED", True, BLACK)
            screen.blit(pause_text, (WIDTH - pause_text.get_width() - 10, 10))
        mode = "TEAR" if controller.tear_mode else ("ANCHOR" if controller.anchor_intent else "")
        if mode:
            mode_text = font.render(mode, True, BLACK)
            screen.blit(mode_text, (10, 10))
        count_surf = font.render(f"Constraints: {len(world.cloth.constraints)}", True, BLACK)
        screen.blit(count_surf, (10, HEIGHT - 30))

        pygame.display.flip()
        clock.tick(FPS)

    if gui_proc is not None:
        shared['__exit__'] = True
        gui_proc.join(timeout=1.0)

    pygame.quit()


if __name__ == "__main__":
    main()

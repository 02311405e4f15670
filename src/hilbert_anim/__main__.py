from hilbert_anim.cli.app import main

main()
